"""Calendar serialization components."""
