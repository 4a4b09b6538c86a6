# Copyright Stratus Labs 2026

# Note: Reset this value to -1 whenever you make a minor `0.X` release of the client.
build_number = 12  # git: 3f1c2ab
