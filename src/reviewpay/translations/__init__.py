"""Localised message catalogues bundled with the package."""
