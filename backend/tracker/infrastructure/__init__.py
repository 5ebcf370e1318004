"""Infrastructure — engine lifecycle, SQL repository, logging setup."""
