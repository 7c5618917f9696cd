"""
Engineering constants for rectangular beam design.
"""

# Main bar diameters searched by the option generator (mm)
MAIN_BAR_SIZES = [12, 16, 20, 25]

# Stirrup bar diameters searched by the option generator (mm)
STIRRUP_BAR_SIZES = [6, 10, 12]

# Stirrup leg counts, tried fewest first
STIRRUP_LEGS = [2, 3, 4]

# Stirrup spacings (mm), tried widest first
STIRRUP_SPACINGS = [300, 250, 200, 150, 100, 50]

# Options above this utilization are discarded
MAX_UTILIZATION = 0.95

# Minimum clear spacing between bars in a layer (mm)
MIN_CLEAR_BAR_SPACING = 25.0

# Ultimate strains used when the material table has none
DEFAULT_CONCRETE_STRAIN = 0.003
DEFAULT_REBAR_STRAIN = 0.0025

# Assumed top bars for the long-term deflection multiplier: 2 x 12 mm
KCS_TOP_BAR_COUNT = 2
KCS_TOP_BAR_DIAMETER = 12.0
