"""Services — orchestrate core rules and repository calls per endpoint."""
