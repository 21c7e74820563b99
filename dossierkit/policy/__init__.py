"""Policy modes, network allowlist entries and network snapshots."""