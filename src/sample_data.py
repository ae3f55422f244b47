"""Seed family shown when storage holds no saved tree yet."""

from models import Gender, Person

_IMG = "https://images.unsplash.com/photo-{}?auto=format&fit=crop&q=80&w=400&h=400"


def sample_people() -> list[Person]:
    """The Harrison family: one patriarch, two married children, six grandchildren."""
    return [
        Person(
            id="root-1",
            name="George Harrison Sr.",
            gender=Gender.MALE,
            birth_date="1920-05-12",
            death_date="1995-11-20",
            bio="The patriarch of the Harrison family. A decorated veteran and master carpenter.",
            main_image=_IMG.format("1472099645785-5658abf4ff4e"),
            gallery=[_IMG.format("1507679799987-c73779587ccf"), _IMG.format("1544161515-4af6b1d462c2")],
        ),
        Person(
            id="child-1",
            name="Martha Harrison-Vance",
            gender=Gender.FEMALE,
            birth_date="1945-08-22",
            bio="A visionary educator who served as Dean of Arts.",
            main_image=_IMG.format("1544005313-94ddf0286df2"),
            parent_id="root-1",
            spouse_id="spouse-martha",
        ),
        Person(
            id="spouse-martha",
            name="Dr. Robert Vance",
            gender=Gender.MALE,
            birth_date="1942-03-10",
            death_date="2015-06-14",
            bio="A renowned surgeon and amateur cellist.",
            main_image=_IMG.format("1500648767791-00dcc994a43e"),
            spouse_id="child-1",
        ),
        Person(
            id="martha-child-1",
            name="Sarah Vance",
            gender=Gender.FEMALE,
            birth_date="1970-11-05",
            bio="An environmental lawyer based in Portland.",
            main_image=_IMG.format("1438761681033-6461ffad8d80"),
            parent_id="child-1",
        ),
        Person(
            id="child-2",
            name="Arthur Harrison",
            gender=Gender.MALE,
            birth_date="1948-03-15",
            bio="An architect who specialized in sustainable urban design.",
            main_image=_IMG.format("1507003211169-0a1dd7228f2d"),
            parent_id="root-1",
            spouse_id="spouse-arthur",
        ),
        Person(
            id="spouse-arthur",
            name="Evelyn Thorne",
            gender=Gender.FEMALE,
            birth_date="1952-12-01",
            bio="A professional landscape photographer.",
            main_image=_IMG.format("1494790108377-be9c29b29330"),
            spouse_id="child-2",
        ),
        Person(id="arthur-child-1", name="Lily Harrison", gender=Gender.FEMALE,
               birth_date="1975-06-12", bio="An interior designer.", parent_id="child-2"),
        Person(id="arthur-child-2", name="David Harrison", gender=Gender.MALE,
               birth_date="1978-09-22", bio="A commercial pilot.", parent_id="child-2"),
        Person(id="arthur-child-3", name="Michael Harrison", gender=Gender.MALE,
               birth_date="1982-02-14", bio="Software engineer and founder.", parent_id="child-2"),
        Person(id="arthur-child-4", name="Claire Harrison", gender=Gender.FEMALE,
               birth_date="1985-05-30", bio="A marine biologist.", parent_id="child-2"),
        Person(id="arthur-child-5", name="Sophia Harrison", gender=Gender.FEMALE,
               birth_date="1988-11-11", bio="A pastry chef.", parent_id="child-2"),
        Person(id="michael-child-1", name="Oliver Harrison", gender=Gender.MALE,
               birth_date="2015-07-04", bio="A curious young boy who loves drawing.",
               parent_id="arthur-child-3"),
    ]
