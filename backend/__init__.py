"""Flask HTTP surface for the job search pipeline."""
