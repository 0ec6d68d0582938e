"""Infrastructure: logging, utilities and factories."""
