"""Service layer: renders the SEO documents."""
