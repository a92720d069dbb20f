"""
Default numerical and training settings.

Every value here can be overridden per call through the matching keyword
argument of the function that uses it.
"""

# B-spline root finding
SPLINE_DEGREE = 3
BISECTION_TOLERANCE = 1e-8
BISECTION_MAX_ITER = 50
NEAR_ZERO_SLOPE = 1e-10
FINITE_DIFFERENCE_STEP = 1e-6

# Steepness-from-point solver
CENTER_TOLERANCE = 0.01

# Change-of-variables evaluator
LARGE_VALUE_THRESHOLD = 1e3
DEFAULT_SAMPLE_COUNT = 400

# Editors
SIGMOID_STEEPNESS_DISTANCE = 1.0
SIGMOID_Y_CLIP = (0.01, 0.99)
SIGMOID_X_DOMAIN = (-10.0, 10.0)
LOGIT_STEEPNESS_LEFT_X = 0.25
LOGIT_STEEPNESS_RIGHT_X = 0.75
LOGIT_Y_DOMAIN = (-8.0, 8.0)
CONTROL_POINT_MARGIN = 0.02
DEFAULT_CONTROL_POINTS = ((0.33, 0.33), (0.67, 0.67))

# Coupling-layer flow and training
NUM_LAYERS = 8
HIDDEN_DIMS = 24
NUM_EPOCHS = 1000
BATCH_SIZE = 256
LEARNING_RATE = 1e-3
MOONS_NOISE = 0.05
MAX_GRAD_NORM = 1.0
LOG_EVERY = 10
