"""Runtime services (telemetry) shared by the splicer."""
