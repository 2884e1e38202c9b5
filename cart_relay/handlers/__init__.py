"""HTTP endpoint handlers: auth, the event stream and the message channel."""
