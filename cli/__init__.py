"""sitegrab command-line front end."""
