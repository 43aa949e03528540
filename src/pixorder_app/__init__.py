"""
PixOrder - sort photos and videos into folders by aspect ratio.
"""

__version__ = "1.0.0"
