# constants.py

"""
Application Constants

This module defines static configuration values for the application's framework.
These are not expected to change between simulation runs.

Data Contract:
- All values are immutable constants.
- Units are specified in comments where applicable.
"""

# Screen dimensions
WIDTH = 1280  # Pixels
HEIGHT = 800  # Pixels

# Framerate
FPS = 60  # Frames per second

# Simulated seconds per frame. Age advances by this fixed step regardless of
# the real interval between frames.
TIME_STEP = 1 / 60

# Colors (RGB)
WHITE = (255, 255, 255)
PANEL = (40, 40, 60)

# Window Title
TITLE = "Greenhouse Atmosphere"

# Warming potential at which the background reaches the last color stop.
MAX_WARMING_POTENTIAL = 150.0

# Background color stops.
# Each keyframe is a tuple: (warming_ratio, (R, G, B) color).
COLOR_STOPS = [
    (0.0, (12, 12, 26)),      # Dark navy
    (0.4, (139, 69, 19)),     # Brown
    (0.7, (255, 215, 0)),     # Gold
    (1.0, (255, 69, 0)),      # Orange-red
]

# Visual Effects
TRAIL_ALPHA = 0.2  # Opacity of the per-frame background overlay (lower = longer trails).

# Bloom effect settings
BLOOM_RADIUS = 20 # Downscale factor for the glow blur. Larger is more diffuse.
BLOOM_INTENSITY = 60 # The brightness of the glow (0-255).

# HUD layout
BUTTON_WIDTH = 170
BUTTON_HEIGHT = 36
BUTTON_MARGIN = 12
FONT_SIZE = 22
