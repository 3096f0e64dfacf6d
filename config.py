"""
Cross Pose Coach Configuration
==============================

Central configuration file for all pipeline parameters.
"""

# =============================================================================
# Camera Settings
# =============================================================================
CAMERA_ID = 0
CAMERA_WIDTH = 640
CAMERA_HEIGHT = 480

# =============================================================================
# MediaPipe Pose Settings (stands in for the depth sensor skeleton stream)
# =============================================================================
MIN_DETECTION_CONFIDENCE = 0.5
MIN_TRACKING_CONFIDENCE = 0.5
MODEL_COMPLEXITY = 1

# Landmark visibility -> joint tracking state
TRACKED_VISIBILITY = 0.65   # >= : TRACKED
INFERRED_VISIBILITY = 0.30  # >= : INFERRED, below: NOT_TRACKED

# World landmarks are hip-centred; shift them so z reads as distance from camera
SENSOR_DEPTH_OFFSET = 2.0   # meters

# =============================================================================
# Pose Classification Settings
# =============================================================================
TARGET_LEG_ANGLE = 10.0     # degrees, knee-ankle angle of the lifted leg
TOLERANCE_FACTOR = 0.05     # +/- 5% band
MIN_TARGET_ANGLE = 0.0
MAX_TARGET_ANGLE = 90.0
GATE_UNTRACKED_JOINTS = True  # NOT_TRACKED joints make their region INVALID

# =============================================================================
# Projection Settings (sensor space -> screen, Kinect v1 depth camera)
# =============================================================================
RENDER_WIDTH = 640
RENDER_HEIGHT = 480
FOCAL_LENGTH_PX = 571.4     # 640x480 depth stream

# =============================================================================
# Display Settings
# =============================================================================
WINDOW_NAME = "Cross Pose Coach - Real-time Feedback"
FONT_SCALE = 0.7
BONE_THICKNESS = 6
INFERRED_BONE_THICKNESS = 1
JOINT_RADIUS = 3
BODY_CENTER_RADIUS = 10
CLIP_BOUNDS_THICKNESS = 10
SCREENSHOT_DIR = "screenshots"

# Colors (BGR format)
COLOR_RED = (0, 0, 255)
COLOR_GREEN = (0, 128, 0)
COLOR_YELLOW = (0, 255, 255)
COLOR_CYAN = (255, 255, 0)
COLOR_BLUE = (255, 0, 0)
COLOR_GRAY = (128, 128, 128)
COLOR_WHITE = (255, 255, 255)
COLOR_BLACK = (0, 0, 0)
COLOR_JOINT_TRACKED = (185, 218, 255)    # peach
COLOR_JOINT_REGION = (68, 192, 68)
COLOR_JOINT_INFERRED = COLOR_YELLOW
COLOR_BONE_TRACKED = COLOR_RED
