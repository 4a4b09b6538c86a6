# Copyright Stratus Labs 2026
import synchronicity

synchronizer = synchronicity.Synchronizer()
