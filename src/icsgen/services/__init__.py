"""Services for the ICS generator."""
