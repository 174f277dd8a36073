"""Annual heating/cooling energy and cost simulation against historical weather."""
