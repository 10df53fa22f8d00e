"""Memory hotplug compatibility rules."""
