"""Infrastructure adapters: input sources, page fetchers and result sinks."""
