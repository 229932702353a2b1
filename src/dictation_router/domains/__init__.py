"""Domain knowledge packages."""
