"""Request and response models. JSON keys are camelCase, attributes snake_case."""
