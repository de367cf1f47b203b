"""brickstmt utilities."""
