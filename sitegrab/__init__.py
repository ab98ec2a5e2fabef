"""sitegrab — render a web page and keep its HTML, screenshot and links."""

__version__ = "0.1.0"
