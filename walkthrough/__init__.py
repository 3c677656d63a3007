"""
ai-walkthrough - turn recorded product workflows into narrated videos.
"""

__version__ = "0.1.0"
