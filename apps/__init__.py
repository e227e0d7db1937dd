"""Django applications of the StayNest marketplace."""
