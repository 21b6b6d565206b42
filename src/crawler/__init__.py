"""Accessibility statement discovery over first-level links of organization homepages."""
