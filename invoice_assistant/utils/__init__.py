"""Display formatting helpers shared by the tools and the chat responder."""
