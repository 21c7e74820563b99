"""Contract text extraction, clause anchors, risk review and rendering."""