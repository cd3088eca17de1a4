"""clerc - Command LinE Riak Client."""

__version__ = "0.1"

BANNER = f"clerc (Command LinE Riak Client) {__version__}"
