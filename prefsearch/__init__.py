# prefsearch Package
"""
Settings search for applications built from plugins.

Lets a user type free text and find any configuration surface: enabled
plugins, configuration screens, individual settings and dialogs.

Packages:
  - search:   index building, normalization, ranking
  - services: registries, string catalogs, the debounced query pipeline
  - utils:    settings, GLib timer scheduler
"""

__version__ = "0.1.0"
