"""Analysis services: transport, polling, and orchestration."""
