"""Click commands for vertag."""
