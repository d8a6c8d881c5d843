"""Connectors por provedor — adapters de borda para APIs externas.

Estrutura:
- neynar/: assinatura do webhook e lookup de perfis em lote
- telegram/: entrega das notificações (Bot API)

Cada provedor tem seu próprio connector, garantindo SRP e isolamento de falhas.
"""

__all__: list[str] = []
