"""Domain operations on the credential and task stores."""
