"""Host-level defaults shared by the window and the exporter."""

DEFAULT_WIDTH = 480
DEFAULT_HEIGHT = 320
DEFAULT_FPS = 60

# QTimer interval for the desktop host, in milliseconds
TIMER_INTERVAL_MS = 16

DEMOS = ("fields", "voronoi", "waves")
DEMO_TITLES = {
    "fields": "Chaotic Fields",
    "voronoi": "Voronoi Growth",
    "waves": "Wave Interference",
}
