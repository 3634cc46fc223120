"""Infrastructure layer: adapters, stubs and observability for TaskHub."""
