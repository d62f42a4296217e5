"""Okanjo commission report export."""
