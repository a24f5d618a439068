"""Host platform integrations for Karmic Dice."""
