"""Battle domain: models, affinity defaults and roster scaling."""
