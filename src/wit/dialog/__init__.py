"""Label composition dialog: state, rendering and printing."""
