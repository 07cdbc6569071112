"""Developer command line for the ATHLO coaching core."""
