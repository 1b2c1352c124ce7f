from brewlet.manifest import BinInstallStep, PackageManifest, RenameStep

bub = PackageManifest(
    name="bub",
    description="bub a cli tool for all your bench needs",
    homepage="https://github.com/benchlabs/bub",
    version="0.7.1",
    url="https://s3bucket/contrib/bub-{version}-darwin-amd64.gz",
    sha256="9929f95055c00d3146bc4e0ff0beb5429fbf3914786f0f59ac3f6d9924b3bda8",
    install_steps=[
        RenameStep(source="bub-{version}-darwin-amd64", target="bub"),
        BinInstallStep(file="bub"),
    ],
)
