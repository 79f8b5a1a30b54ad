"""Translation catalog manager: key scanner, tree engine, file/database drivers."""
