"""HTTP and WebSocket API for TaskSync."""
