"""Mithril Cars API package."""
