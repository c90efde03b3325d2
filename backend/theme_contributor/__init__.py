"""
Theme Contributor Service
Flow: bundles contribute resources -> registry publishes URLs -> theme head renders links
"""

__version__ = "0.1.0"
