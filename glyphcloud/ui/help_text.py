"""
Reusable help strings for UI tooltips and glossary.
"""

# Short one-liners for widget help=
TOOLTIP_WORDS = "One word per line: 'word weight' or 'word<TAB>weight'. Lines starting with # are ignored."
TOOLTIP_UPLOAD = "JSON list of {text, weight, color?}, CSV with a text,weight header, or plain text."
TOOLTIP_GRID = "Cell size (px) of the collision grid. Smaller = tighter packing, slower layout."
TOOLTIP_SHRINK = "When a word does not fit, retry at 80% font size down to the minimum."
TOOLTIP_MASK = "Restrict words to a silhouette. Upload a PNG with transparency or an SVG for custom shapes."
TOOLTIP_SEED = "Fixes the rotation choice so the same input gives the same cloud."
TOOLTIP_SCALE = "1x = canvas size; 2x and 4x give sharper PNG downloads."

EXAMPLE_WORDS = """python 40
layout 28
grid 22
spiral 18
mask 16
glyph 14
shrink 12
collision 10
weight 9
canvas 8
rotation 7
palette 6
pixel 5
font 4
cloud 3
"""

GLOSSARY_MD = """
### Occupancy grid
Coarse raster over the canvas (one cell = *grid size* px). A word can only go where every
cell under its ink box is still free.

### Spiral search
Candidate positions are tried ring by ring from the centre outwards, so big words claim the middle.

### Shrink-to-fit
A word that fits nowhere is retried at 80% of its font size until the minimum size is reached;
after that it is dropped from the cloud.

### Mask
A silhouette (heart, circle, star, cloud or your own image). Only cells covered by the mask start free.
Glyph edges may spill a few pixels past the silhouette because only grid cells are checked.
"""
