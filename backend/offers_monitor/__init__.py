"""Steam Offers Monitor: discovers discounted apps in the Steam catalog."""

__version__ = "0.1.0"
