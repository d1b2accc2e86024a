"""rpcserver — HTTP transport and example handlers."""
