# constants.py
"""
Application-level constants.

These values are static and do not change between runs. They belong to the
application's framework (overlay layout, window defaults, fixed interaction
steps) rather than to the experimental configuration in `config.json`.
"""

# Visualization settings
DEFAULT_WINDOW_SIZE = (1280, 726)
FPS = 60
BACKGROUND_COLOR = (255, 255, 255)  # White
LINE_COLOR = (0, 0, 0)  # Connectors are drawn in black with variable opacity
TEXT_COLOR = (0, 0, 0)
WINDOW_CAPTION = "Particles"

# The drawing surface is kept slightly shorter than the viewport so it never
# overlaps a host scrollbar.
VIEWPORT_HEIGHT_OFFSET = 6

# --- Particle defaults ---
# Radius range used when a particle is built without an explicit radius
# (i.e. outside the engine's factory).
DEFAULT_PARTICLE_RADIUS_RANGE = (5, 20)
DEFAULT_PARTICLE_SPEED = 0.1
DEFAULT_PARTICLE_COLOR = "black"

# --- Pointer interaction ---
# Distance a particle is displaced per frame toward/away from the pointer.
POINTER_STEP = 2.0
# The pointer must be strictly inside the viewport shrunk by this margin
# for attraction/repulsion to apply.
POINTER_EDGE_MARGIN = 10
POINTER_MARKER_RADIUS = 10
POINTER_MARKER_COLOR = "#000000"
PAUSE_KEY = "space"

# --- Diagnostic overlay ---
OVERLAY_FONT_SIZE = 12
OVERLAY_FONT_FAMILY = "sans-serif"
OVERLAY_X = 10
OVERLAY_LINE_SPACING = 20
