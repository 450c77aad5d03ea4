"""
Laravel shared hosting builder

Stages a Laravel project into dist/ with public assets at the top level and
the framework internals in dist/laravel/, ready for hosts that only expose a
single public web root.
"""
__version__ = "1.2.1"
