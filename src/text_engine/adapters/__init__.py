"""Host integrations: exporters and the Textual front end."""
