"""
Passport service package.

Issues, validates and revokes the signed tokens that authenticate admin
users of the backend:

- app.tokens: Token engine (builder, signer resolution, encode/parse,
  validation, signature verification, per-claim encryption).
- app.revocation: Revocation store contract with memory and Redis backends.
- app.passport: Access/refresh token pair issuance and the logout workflow.
- app.commands: Operator command line tools.

Design notes:
- Keep the package import side-effects minimal; module import must not
  perform network calls. Store IO happens only inside explicit calls.
- Use the shared/ utilities for configuration, logging and errors.
- The engine is stateless; the revocation store is the only shared state.
"""
