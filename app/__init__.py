"""VitaReach telemedicine backend."""
