"""ATHLO coaching intelligence core."""
