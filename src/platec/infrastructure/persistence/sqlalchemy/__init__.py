"""SQLAlchemy persistence for the school application."""
