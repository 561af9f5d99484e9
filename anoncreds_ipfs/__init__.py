"""AnonCreds object registry backed by IPFS."""
