"""Domain models, catalogs and pure game rules."""
