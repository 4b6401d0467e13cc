"""Catalog domain: schema models, the data store layer and species services."""
