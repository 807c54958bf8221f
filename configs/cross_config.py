"""
Cross Demo Configuration
========================

Defaults for ``cross_demo.py``. Command-line arguments take precedence.
"""

# ============================================================================
# Parents
# ============================================================================

# Crossed when no genotypes are given on the command line
DEFAULT_PARENTS = ('RrYYWWss', 'RrYYWWss')

# ============================================================================
# Output
# ============================================================================

# Level name passed to logging.basicConfig
LOG_LEVEL = 'WARNING'

# Format string applied to float probabilities ('' prints the float as-is)
PROBABILITY_FORMAT = ''
