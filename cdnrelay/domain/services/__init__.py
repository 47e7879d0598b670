"""Domain services: classification, naming, origin selection and loading."""
