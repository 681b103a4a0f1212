"""Integração Django: models, repositórios, views e eventos."""
