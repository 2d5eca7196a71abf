from decimal import Decimal

from django.core.management.base import BaseCommand

from futstore.catalog.models import Camisa

UNSPLASH = "https://images.unsplash.com/photo-{}?w=600&h=600&fit=crop"

# nome, time, categoria, preço, preço original, estoque, fotos, descrição, nota, avaliações
CAMISAS = [
    ('Camisa Flamengo I 2024', 'Flamengo', 'brasileiro', '199.90', '299.90', 3,
     ['1551854304-dbbb1c3a6fba', '1579952363873-27f3bade9f55'],
     'Camisa oficial do Flamengo para a temporada 2024. Tecido leve e respirável.', '4.8', 234),
    ('Camisa Corinthians I 2024', 'Corinthians', 'brasileiro', '249.90', None, 15,
     ['1517466787929-bc90951d0974', '1574629810360-7efbbe195018'],
     'A camisa titular do Corinthians 2024, em preto e branco com detalhes exclusivos.', '4.6', 189),
    ('Camisa Barcelona I 2024', 'Barcelona', 'europeu', '349.90', '449.90', 8,
     ['1489944440615-453fc2b6a9a9', '1522778119026-d647f0596c20'],
     'Camisa oficial do FC Barcelona 2024/25 com as listras azul e grená.', '4.9', 412),
    ('Camisa Real Madrid I 2024', 'Real Madrid', 'europeu', '349.90', None, 20,
     ['1431324155629-1a6deb1dec8d', '1508098682722-e99c43a406b2'],
     'A camisa branca do Real Madrid para 2024/25.', '4.7', 356),
    ('Camisa Palmeiras I 2024', 'Palmeiras', 'brasileiro', '229.90', '279.90', 2,
     ['1459865264687-595d652de67e', '1560272564-c83b66b1ad12'],
     'Camisa oficial do Palmeiras 2024 no verde alviverde.', '4.5', 178),
    ('Camisa São Paulo I 2024', 'São Paulo', 'brasileiro', '239.90', None, 12,
     ['1606107557195-0e29a4b5b4aa', '1516475429286-465d815a0df7'],
     'A clássica camisa tricolor do São Paulo FC para 2024.', '4.4', 145),
    ('Camisa Manchester City I 2024', 'Manchester City', 'europeu', '379.90', '449.90', 5,
     ['1553778263-73a83bab9b0c', '1518091043644-c1d4457512c6'],
     'Camisa titular do Manchester City 2024/25 no azul celeste.', '4.8', 267),
    ('Camisa Seleção Brasil I 2024', 'Brasil', 'selecoes', '299.90', None, 25,
     ['1518091043644-c1d4457512c6', '1574629810360-7efbbe195018'],
     'A amarelinha oficial da Seleção Brasileira.', '4.9', 523),
]


class Command(BaseCommand):
    help = 'Carrega o catálogo inicial de camisas'

    def handle(self, *args, **kwargs):
        self.stdout.write('Criando camisas...')

        for (nome, time, categoria, preco, preco_original, estoque, fotos, descricao,
             avaliacao, total_avaliacoes) in CAMISAS:
            camisa, created = Camisa.objects.get_or_create(
                nome=nome,
                defaults={
                    'time': time,
                    'categoria': categoria,
                    'descricao': descricao,
                    'preco': Decimal(preco),
                    'preco_original': Decimal(preco_original) if preco_original else None,
                    'em_promocao': preco_original is not None,
                    'estoque': estoque,
                    'imagens': [UNSPLASH.format(foto) for foto in fotos],
                    'avaliacao': Decimal(avaliacao),
                    'total_avaliacoes': total_avaliacoes,
                },
            )
            if created:
                self.stdout.write(self.style.SUCCESS(f'Criada camisa "{camisa.nome}"'))

        self.stdout.write(self.style.SUCCESS('Catálogo carregado com sucesso!'))
