"""GUI layer: headless view models plus the Qt widgets that render them."""
