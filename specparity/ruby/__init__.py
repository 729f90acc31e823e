"""Ruby source analysis: parsing, method sites, visibility and branch counts."""
