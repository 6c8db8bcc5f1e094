"""Job offer capture from rendered pages."""
