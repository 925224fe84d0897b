"""Static project catalog shown on the home page."""

from portfolio.models.content import Project

PROJECTS: list[Project] = [
    Project(
        hero="https://file.swayechateau.com/view/swayechateauWLGYnBgsrYxGZSputQx822",
        title="The Coldest Sunset",
        excerpt=(
            "Lorem ipsum dolor sit amet, consectetur adipisicing elit. "
            "Voluptatibus quia, nulla! Maiores et perferendis eaque, "
            "exercitationem praesentium nihil."
        ),
        tags=["photography", "travel", "winter"],
        open_source=True,
        git_repo="https://github.com/swayechateau/fileserver",
        live_url="https://file.swayechateau.com",
        case_study="https://nobodycare.dev/en/post/building-a-file-server-api",
    ),
    Project(
        hero="https://file.swayechateau.com/view/globaliyndTnSCK14onpASVq7n5?share_code=s5LUL0lAdDLS",
        title="File Server",
        excerpt="Custom built CDN for my media files.",
        tags=["markdown", "lumen", "microservice", "mariadb", "api"],
        open_source=True,
        git_repo="https://github.com/swayechateau/fileserver",
        live_url="https://file.solemnity.icu",
        case_study="https://nobodycare.dev/en/post/building-a-file-server-api",
    ),
    Project(
        hero="https://file.swayechateau.com/view/globalMaJKf2UDzFdqba7hG96U6?share_code=s6LHjQlIsFHc",
        title="Web Meta Grabber",
        excerpt=(
            "I Wanted an api I had permissions to use to get the meta data "
            "from websites for a chat application I was building."
        ),
        tags=["markdown", "go", "docker", "microservice", "api"],
        open_source=True,
        git_repo="https://github.com/swayechateau/web-meta-grabber",
        live_url="https://meta.solemnity.icu/",
        case_study="https://nobodycare.dev/en/posts/web-meta-grabber",
    ),
]
