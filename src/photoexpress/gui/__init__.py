"""Qt front-end for PhotoExpress."""
