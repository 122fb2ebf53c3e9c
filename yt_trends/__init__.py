"""YouTube trends retrieval and analytics"""

__version__ = "1.0.0"
