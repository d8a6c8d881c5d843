"""App — orquestração do pipeline de notificações.

Subpastas:
- bootstrap/: composition root (factories, inicialização, wiring)
- use_cases/: casos de uso (webhook Neynar)
- services/: diff de perfil, formatação e dispatch
- infra/: implementações concretas de IO (stores, cliente HTTP base)
- protocols/: contratos/interfaces e modelos de evento
- domain/: snapshot de perfil
- observability/: contexto de entrega e métricas via logs

Padrão: app executa; api adapta; utils apoia.
"""
