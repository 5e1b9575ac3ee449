"""Pure, toolkit-free building blocks of the panel."""
