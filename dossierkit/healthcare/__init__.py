"""Clinical transcript parsing, consent checks and draft note rendering."""