"""Backend services for the ReviewPay marketplace."""
