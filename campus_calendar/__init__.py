"""Campus Calendar - academic event calendar core."""
