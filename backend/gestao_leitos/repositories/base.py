"""
Repository Base.
Operações de leitura e gravação comuns a todas as tabelas.
"""
from typing import TypeVar, Generic, Iterable, Optional, List, Type
from sqlmodel import Session, select

T = TypeVar("T")


class BaseRepository(Generic[T]):
    """
    Repository base genérico.

    Nenhum método faz commit: a transação pertence ao serviço.

    Uso:
        class MeuRepository(BaseRepository[MeuModelo]):
            def __init__(self, session: Session):
                super().__init__(session, MeuModelo)
    """

    def __init__(self, session: Session, model: Type[T]):
        self.session = session
        self.model = model

    def obter_por_id(self, id: str) -> Optional[T]:
        """
        Obtém um registro pelo ID.

        Returns:
            O registro ou None se não existir
        """
        return self.session.get(self.model, id)

    def obter_por_ids(self, ids: Iterable[str]) -> List[T]:
        """Registros dos IDs informados, na ordem dos IDs (ausentes são ignorados)."""
        ids = [id for id in dict.fromkeys(ids) if id]
        if not ids:
            return []
        query = select(self.model).where(self.model.id.in_(ids))
        por_id = {obj.id: obj for obj in self.session.exec(query).all()}
        return [por_id[id] for id in ids if id in por_id]

    def obter_todos(self) -> List[T]:
        """Todos os registros da tabela."""
        return list(self.session.exec(select(self.model)).all())
