"""Template sources for generated Express applications."""
