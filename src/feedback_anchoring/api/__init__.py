"""HTTP adapter exposing the pure anchoring and render pipeline."""
