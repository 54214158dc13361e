"""Services — hierarchy flattening, registration, packets, cleaning, generators."""
