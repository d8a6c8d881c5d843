"""API — camada de borda e adapters do provedor.

Responsabilidades:
- Receber o webhook Neynar e validar assinatura
- Normalizar payloads para os modelos internos
- Falar com APIs externas (lookup Neynar, Telegram Bot API)

Subpastas:
- connectors/: adapters HTTP por provedor
- normalizers/: conversão de payloads externos → modelos internos
- routes/: endpoints HTTP (webhook, health)

NÃO PODE conter: orquestração de use cases, estado do processo.
"""
