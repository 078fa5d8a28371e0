"""HTTP API for one monitored set-top box."""
