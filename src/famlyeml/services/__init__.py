"""Services that turn a field table into an enrollment record."""
