"""Internal building blocks: request/response models and the HTTP transport."""
