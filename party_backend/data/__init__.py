"""Static game content: themes, demo playlist and identity pools."""
