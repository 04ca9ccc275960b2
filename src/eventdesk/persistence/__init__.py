"""Flat-file persistence.

Layout (one CSV file per entity, header row first):

    <data_dir>/
    ├── eventos.csv         id,nome,descricao,categoria,data,capacidade,vagasDisponiveis
    ├── participantes.csv   id,nome,email,telefone
    └── inscricoes.csv      idParticipante,idEvento,dataInscricao,status

File names are configurable through ``[storage]`` in eventdesk.toml.
"""

from eventdesk.persistence.files import DataPaths, LoadReport, load_all, save_all

__all__ = ["DataPaths", "LoadReport", "load_all", "save_all"]
