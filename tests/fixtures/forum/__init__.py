"""Forum fixture package, partially overridden by the app namespace."""
