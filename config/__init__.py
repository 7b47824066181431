"""Константи та дефолти проєкту."""
