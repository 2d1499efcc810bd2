"""Build and verification runner for the SEO documents."""
