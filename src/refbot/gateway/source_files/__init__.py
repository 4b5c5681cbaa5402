"""Source file enumeration gateway."""
