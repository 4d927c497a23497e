"""JSON API blueprints and the request helpers they share."""
