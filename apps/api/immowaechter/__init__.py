"""ImmoWächter maintenance reminder API."""
