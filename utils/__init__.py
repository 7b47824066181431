"""Спільні утиліти консолі/логування."""
