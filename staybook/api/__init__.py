"""
HTTP API. Build the application with ``staybook.api.app.create_app``.
"""
