# faktory_cli/__init__.py
"""Process bootstrap and lifecycle control for the Faktory job server."""

__app_name__ = "Faktory"
__version__ = "0.1.0"
__license__ = "Licensed under the GNU Affero Public License 3.0"
