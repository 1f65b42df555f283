"""ListingView - filter, sort and page the classifieds of a building."""

__version__ = "0.1.0"
