"""HTTP surface for the rulebook compiler and board topology engine."""
