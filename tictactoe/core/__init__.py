"""Game events: what the controller records for the current game and hands to subscribers."""
