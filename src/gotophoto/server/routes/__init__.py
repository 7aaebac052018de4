"""Route modules included by :func:`gotophoto.server.app.create_app`."""
