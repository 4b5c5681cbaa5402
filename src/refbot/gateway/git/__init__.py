"""Git gateway: abstract interface with real (subprocess) and fake implementations."""
