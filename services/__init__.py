"""Service helpers shared by the HTTP routes and the admin tools."""
